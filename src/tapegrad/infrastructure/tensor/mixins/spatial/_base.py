"""
Spatial mixin defining parameterless resampling operations.

Upscaling is a stateless transformation selected by the target size (or
integer factors) and an interpolation method tag. The forward computation is
delegated entirely to the kernel of the chosen method; when the input is
traced, the method's kernel also provides the weighted-scatter backward.
"""

from abc import ABC
from typing import Any, Optional


class TensorMixinSpatial(ABC):
    """
    Abstract mixin defining 2D upscaling on ``(C, H, W)`` and
    ``(N, C, H, W)`` tensors.

    Raises
    ------
    ShapeMismatchError
        If the tensor is not rank 3 or 4.
    ValueError
        If a size or factor is not a positive integer.
    """

    def upscale2d(
        self, oh: int, ow: Optional[int] = None, method: Any = None
    ) -> "TensorMixinSpatial":
        """
        Resample the two trailing axes to ``(oh, ow)``.

        Parameters
        ----------
        oh : int
            Output height.
        ow : int, optional
            Output width. Defaults to `oh`.
        method : UpscaleMethod or str, optional
            Interpolation method (``"nearest"`` or ``"bilinear"``).
            Defaults to nearest neighbor.

        Returns
        -------
        Tensor
            Tensor of shape ``self.shape[:-2] + (oh, ow)``.
        """

    def upscale2d_by(
        self, fh: int, fw: Optional[int] = None, method: Any = None
    ) -> "TensorMixinSpatial":
        """
        Resample the two trailing axes by integer factors.

        Parameters
        ----------
        fh : int
            Height factor.
        fw : int, optional
            Width factor. Defaults to `fh`.
        method : UpscaleMethod or str, optional
            Interpolation method. Defaults to nearest neighbor.

        Returns
        -------
        Tensor
            Tensor of shape ``self.shape[:-2] + (H * fh, W * fw)``.
        """

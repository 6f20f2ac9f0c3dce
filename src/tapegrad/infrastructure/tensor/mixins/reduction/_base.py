"""
Reduction mixin defining the public Tensor reduction API.

This module declares :class:`TensorMixinReduction`, an abstract mixin that
specifies the *interface and semantics* of the sum-based reductions. The
mixin performs no computation; implementations are registered per backend
via the control-path dispatch mechanism.
"""

from abc import ABC


class TensorMixinReduction(ABC):
    """
    Abstract mixin defining reduction operations for tensors.

    Notes
    -----
    - Backward rules described in the docstrings are contractual and must be
      respected by every backend.
    - Sum backward is a uniform broadcast with no normalization. A mean is a
      separate operation with its own backward record.
    """

    def sum_last_dim(self) -> "TensorMixinReduction":
        """
        Reduce the last dimension by summation.

        The result has one dimension fewer. A rank-0 tensor has nothing left
        to reduce and is returned as an equal-valued new tensor.

        Returns
        -------
        Tensor
            Tensor of shape ``self.shape[:-1]``.

        Notes
        -----
        Backward rule:
            every input element receives the gradient of the output position
            it was summed into:

                ``dx[..., j] += dy[...]``

        Examples
        --------
        >>> t = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        >>> t.sum_last_dim().data
        array([ 6., 15.], dtype=float32)
        """

    def sum(self) -> "TensorMixinReduction":
        """
        Sum all elements into a rank-0 tensor.

        Notes
        -----
        Backward rule:
            ``dx += dy`` broadcast to every element.
        """

    def mean(self) -> "TensorMixinReduction":
        """
        Arithmetic mean of all elements, as a rank-0 tensor.

        Notes
        -----
        Backward rule:
            ``dx += dy / numel(x)`` broadcast to every element.
        """

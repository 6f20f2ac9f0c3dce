from ._upscale_methods import (
    UpscaleMethod,
    NearestNeighbor,
    Bilinear,
    resolve_upscale_method,
)
from ._upscale_module import Upscale2D, Upscale2DBy

__all__ = [
    UpscaleMethod.__name__,
    NearestNeighbor.__name__,
    Bilinear.__name__,
    resolve_upscale_method.__name__,
    Upscale2D.__name__,
    Upscale2DBy.__name__,
]

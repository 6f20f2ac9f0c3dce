"""
Tensor control-path manager for backend-specific dispatch.

Tensor operations are declared (signature + docstring) on the mixin classes
under ``mixins/`` and implemented by functions registered through this
manager. Dispatch is keyed on ``self.backend``; the NumPy reference backend
registers under ``"numpy"``.

Typical usage
-------------
    @tensor_control_path_manager(TensorMixinReduction, TensorMixinReduction.sum, "numpy")
    def tensor_sum_numpy(self, ...): ...
"""

from ...domain.utils._control_path import create_path_builder

NUMPY_BACKEND = "numpy"

# Control-path manager that dispatches Tensor methods based on `self.backend`
tensor_control_path_manager = create_path_builder("backend")

"""Numba-compiled split kernels.

The kernels work on contiguous numpy buffers and assume validated inputs.
Use :mod:`mlx_splitkit.split` or the splitter classes instead of calling
them directly.
"""

from mlx_splitkit.kernels._split_record import GradientSplitRecord, SplitRecord

__all__ = ["SplitRecord", "GradientSplitRecord"]

"""Data utilities for MLX Splitkit."""

import mlx.core as mx
import numpy as np


def to_mlx_array(data: np.ndarray | mx.array | list) -> mx.array:
    """Convert input data to MLX array.

    Args:
        data: Input data as numpy array, MLX array, or list.

    Returns:
        MLX array.

    Raises:
        TypeError: If input type is not supported.
    """
    if isinstance(data, mx.array):
        return data
    if isinstance(data, np.ndarray):
        return mx.array(data)
    if isinstance(data, list):
        return mx.array(data)
    raise TypeError(f"Unsupported data type: {type(data)}")


def to_numpy_array(data: np.ndarray | mx.array | list) -> np.ndarray:
    """Convert input data to a contiguous numpy array.

    Args:
        data: Input data as numpy array, MLX array, or list.

    Returns:
        Numpy array sharing the dtype of the input where possible.

    Raises:
        TypeError: If input type is not supported.
    """
    if isinstance(data, mx.array):
        return np.ascontiguousarray(np.array(data))
    if isinstance(data, (np.ndarray, list)):
        return np.ascontiguousarray(data)
    raise TypeError(f"Unsupported data type: {type(data)}")


def to_float_array(data: np.ndarray | mx.array | list) -> np.ndarray:
    """Convert input data to a floating point numpy array.

    float32 inputs keep their width so the kernels are compiled for it;
    every other dtype is promoted to float64.

    Args:
        data: Input data as numpy array, MLX array, or list.

    Returns:
        Contiguous float32 or float64 numpy array.
    """
    arr = to_numpy_array(data)
    if arr.dtype == np.float32 or arr.dtype == np.float64:
        return arr
    return arr.astype(np.float64)


def to_index_array(data: np.ndarray | mx.array | list) -> np.ndarray:
    """Convert integer-valued input data to an int64 numpy array.

    Args:
        data: Input data as numpy array, MLX array, or list.

    Returns:
        Contiguous int64 numpy array.

    Raises:
        ValueError: If the data holds non-integral values.
    """
    arr = to_numpy_array(data)
    if arr.dtype.kind in "iu":
        return arr.astype(np.int64, copy=False)
    if arr.dtype.kind == "b":
        return arr.astype(np.int64)
    if arr.size > 0 and not np.array_equal(arr, np.floor(arr)):
        raise ValueError("Expected integer values, got non-integral entries.")
    return arr.astype(np.int64)

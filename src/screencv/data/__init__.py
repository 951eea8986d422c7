"""Dataset construction and loading."""

from screencv.data.dataset import Dataset
from screencv.data.loader import load_tabular_data
from screencv.data.synthetic import make_null_dataset, make_signal_dataset

__all__ = ["Dataset", "load_tabular_data", "make_null_dataset", "make_signal_dataset"]

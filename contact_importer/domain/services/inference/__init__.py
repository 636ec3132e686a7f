from .column_type_inferencer import ColumnTypeInferencer, TypeInference

__all__ = ["ColumnTypeInferencer", "TypeInference"]

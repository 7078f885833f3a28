from .json_extract import extract_json_object

__all__ = ["extract_json_object"]

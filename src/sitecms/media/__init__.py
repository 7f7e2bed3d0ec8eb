from .media_storage import LocalMediaStorage, MediaStorage, build_object_key, sanitize_filename

__all__ = ["LocalMediaStorage", "MediaStorage", "build_object_key", "sanitize_filename"]

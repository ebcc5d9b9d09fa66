from .envelope import ApiSuccess, ApiError

__all__ = ["ApiSuccess", "ApiError"]

class ServiceError(Exception):
    pass


class InvalidURLError(ServiceError):
    pass


class UnsupportedPlatformError(ServiceError):
    def __init__(self, platform: str, reason: str = "platform restrictions prevent access to its content"):
        super().__init__(f"Unsupported platform: {platform} ({reason})")
        self.platform = platform
        self.reason = reason


class ModelConfigurationError(ServiceError):
    pass


class UpstreamError(ServiceError):
    pass


class UpstreamTimeoutError(UpstreamError):
    def __init__(self, timeout_seconds: float):
        super().__init__(f"AI service timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class EmptyResponseError(ServiceError):
    def __init__(self, message: str = "Empty AI response"):
        super().__init__(message)


class InvalidFormatError(ServiceError):
    def __init__(self, message: str, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class ImageResolutionError(ServiceError):
    def __init__(self, url: str, base_url: str):
        super().__init__(f"Cannot resolve image URL {url!r} against {base_url!r}")
        self.url = url
        self.base_url = base_url

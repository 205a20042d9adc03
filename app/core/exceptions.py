class ConfigurationError(Exception):
    """Raised when required configuration is missing.

    The message names the missing setting only, so it is safe to show
    to callers as-is.
    """

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} is required")

from .filesystem_config_provider import CONFIG_FILENAME, FileSystemConfigProvider

__all__ = ["CONFIG_FILENAME", "FileSystemConfigProvider"]

from mr_reviewer.infrastructure.configuration.main_settings import Settings

__all__ = ["Settings"]

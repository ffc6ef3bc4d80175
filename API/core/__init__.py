from .config import settings, get_settings, configure_logging

__all__ = ['settings', 'get_settings', 'configure_logging']

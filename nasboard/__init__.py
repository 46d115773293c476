"""NAS Board: панель администрирования домашнего сервера."""

__version__ = "0.1.0"

"""appdb - application database via .desktop files."""

__app_name__ = "appdb"
__version__ = "1.0.0"

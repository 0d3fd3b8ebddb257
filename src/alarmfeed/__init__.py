"""alarmfeed - paginated JSON listing of the Alarm sa Daskom i Mladjom podcast feed."""

__version__ = "0.1.0"

"""ECF Insight - rating statistics over the English Chess Federation API."""

__version__ = "0.1.0"

"""Extract RDS data from AAC ADTS frames and predict the next channel to tune."""

__version__ = "0.1.0"
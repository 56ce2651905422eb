# journey: publish versioned static web bundles to S3
__version__ = "0.1.0"

"""Build Go source and publish it as the code of an existing AWS Lambda."""

__version__ = "0.1.0"

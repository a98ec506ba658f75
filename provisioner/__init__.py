"""qid-provisioner — interactive installer for the QID OAuth account center."""

__version__ = "0.1.0"

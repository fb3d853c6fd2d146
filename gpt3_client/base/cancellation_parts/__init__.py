"""Implementation modules for ``gpt3_client.base.cancellation``."""

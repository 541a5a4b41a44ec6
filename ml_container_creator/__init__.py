"""ML Container Creator — scaffold SageMaker BYOC model-serving projects."""

__version__ = "0.1.0"

"""
agentrules - rule and agent resolution for AI coding sessions

agentrules indexes rule documents and agent persona descriptors from a
project's directory layout and resolves, for a given task, which rules apply
and which agent persona is the best match.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

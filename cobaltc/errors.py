"""Errors shared by all compiler stages."""


class InternalCompilerError(RuntimeError):
    pass


class UnsupportedFeatureError(RuntimeError):
    pass
"""Exception types shared by the core and the host adapters."""


class H5PTranslatorError(RuntimeError):
    pass


class ProviderUnavailable(H5PTranslatorError):
    """A schema, translation or asset backend could not be reached.

    The core treats this as "skip and continue": the affected value simply
    stays untranslated.
    """


class SemanticsError(H5PTranslatorError):
    """A semantics.json file exists but cannot be parsed."""

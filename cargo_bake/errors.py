"""
Errors — fatal conditions raised by cargo_bake.

Nothing here is retried.  The dispatcher turns any of these into a single
``error: ...`` line on stderr and exit code 1.
"""


class CargoBakeError(Exception):
    """Base class for cargo_bake's own fatal errors."""


class ModeRecordError(CargoBakeError):
    """
    The persisted bake/debug mode is missing or not a recognized value.

    Raised in the compiler-wrapper role when no orchestrator-wrapper process
    wrote the record first, or when the record was altered in between.
    Never defaulted.
    """

    def __init__(self, variable: str, value: str | None):
        self.variable = variable
        self.value = value
        if value is None:
            msg = f"{variable} is not set; cargo-bake must be started as the cargo wrapper"
        else:
            msg = f"{variable} has unrecognized value {value!r}"
        super().__init__(msg)

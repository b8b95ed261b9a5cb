"""Validation result: immutable snapshot of a session's stores."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of one or more validation passes.

    ``is_valid`` is True when no field has an error entry.
    The result is falsy when invalid, so you can write::

        result = validator.validate_mapping(form, rules).result()
        if not result:
            return render("form.html", form=form, errors=result.errors)

    ``values`` contains every value that was validated, valid or not,
    in the store's nested view.

    ``errors`` maps field names to message lists (or rule -> message
    dicts when rule names are kept); groups nest one level deeper::

        {"title": ["\\"\\" must not be empty"],
         "address": {"zip": ["\\"12\\" must have a length between 5 and 5"]}}
    """

    values: dict[str, Any]
    errors: dict[str, Any]

    @property
    def is_valid(self) -> bool:
        """True if the error store was empty."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid, so ``if not result:`` works."""
        return self.is_valid

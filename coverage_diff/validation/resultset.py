import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from coverage_diff.validation.exceptions import InvalidResultsetException
from coverage_diff.validation.schema import schema
from coverage_diff.validation.validator import CoverageDiffValidator

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultsetValidation(object):
    """
    Outcome of checking a decoded resultset against the schema.

    Exactly one side is meaningful: `document` when `is_valid`, the error fields otherwise.
    """

    is_valid: bool
    document: Optional[dict] = None
    error_location: List[Any] = field(default_factory=list)
    error_message: Optional[str] = None
    error_dict: Optional[dict] = None

    def raise_for_errors(self):
        if not self.is_valid:
            raise InvalidResultsetException(
                error_location=self.error_location,
                error_message=self.error_message,
                error_dict=self.error_dict,
            )


def _calculate_error_location_and_message_from_error_dict(error_dict):
    current_value, location_so_far = error_dict, []
    steps_done = 0
    # max depth to avoid being put in a loop
    while steps_done < 20:
        if isinstance(current_value, list) and len(current_value) > 0:
            current_value = current_value[0]
        if isinstance(current_value, dict) and len(current_value) > 0:
            first_key, first_value = next(iter((current_value.items())))
            location_so_far.append(first_key)
            current_value = first_value
        if isinstance(current_value, str):
            return location_so_far, current_value
        steps_done += 1
    return location_so_far, str(current_value)


def check_resultset(inputted_dict) -> ResultsetValidation:
    """Checks a decoded resultset against the resultset schema, without raising.

    Args:
        inputted_dict: The resultset as decoded from its JSON file

    Returns:
        ResultsetValidation: Either a valid result holding the resultset, or an invalid one
            telling where the first problem was found
    """
    if not isinstance(inputted_dict, dict):
        return ResultsetValidation(
            is_valid=False,
            error_message="Resultset needs to be a JSON object",
        )
    validator = CoverageDiffValidator()
    # the run labels are the top level keys, so the whole resultset is nested once
    if not validator.validate({"runs": inputted_dict}, schema, normalize=False):
        error_dict = validator.errors
        (
            error_location,
            error_message,
        ) = _calculate_error_location_and_message_from_error_dict(error_dict)
        # drop the "runs" wrapper from the location
        error_location = error_location[1:]
        log.warning(
            "Resultset does not match the expected schema",
            extra=dict(error_location=error_location, error_message=error_message),
        )
        return ResultsetValidation(
            is_valid=False,
            error_location=error_location,
            error_message=error_message,
            error_dict=error_dict.get("runs"),
        )
    return ResultsetValidation(is_valid=True, document=inputted_dict)


def validate_resultset(inputted_dict) -> dict:
    """
    Returns the resultset if it matches the schema

    Raises:
        InvalidResultsetException: If it does not
    """
    result = check_resultset(inputted_dict)
    result.raise_for_errors()
    return result.document

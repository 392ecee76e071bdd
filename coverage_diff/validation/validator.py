from cerberus import Validator

TRUTHY_FLAGS = ("true", "True", "TRUE", "1", "yes", "on", "On", "ON")
FALSY_FLAGS = ("false", "False", "FALSE", "0", "no", "off", "Off", "OFF", "")


class CoverageDiffValidator(Validator):
    def _normalize_coerce_flag(self, value):
        """
        Turns the ways a flag can be spelled in an environment variable into a bool.
            Anything else is left as is and fails the type check.
        """
        if isinstance(value, bool):
            return value
        if value in (1, 0):
            return bool(value)
        if isinstance(value, str):
            if value in TRUTHY_FLAGS:
                return True
            if value in FALSY_FLAGS:
                return False
        return value

    def _normalize_coerce_comma_separated_ints(self, value):
        if isinstance(value, str):
            try:
                return [int(el.strip()) for el in value.split(",") if el.strip()]
            except ValueError:
                return value
        return value

    def _check_with_not_boolean(self, field, value):
        # JSON true/false decode to bool, which passes cerberus' integer type
        if isinstance(value, bool):
            self._error(field, "must be of integer type, not boolean")

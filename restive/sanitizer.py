import typing as t

FILTERED = "[FILTERED]"


class Sanitizer:
    """
    Masks sensitive values in request parameters before they are logged. A key is sensitive if it starts with one
    of the configured prefixes, ignoring case, so ``Sanitizer("password")`` also masks ``password_confirmation``.
    """

    prefixes: tuple[str, ...]

    def __init__(self, *prefixes: str):
        self.prefixes = tuple(prefix.lower() for prefix in prefixes)

    def is_sensitive(self, key: t.Any) -> bool:
        return isinstance(key, str) and key.lower().startswith(self.prefixes)

    def sanitize(self, value: t.Any) -> t.Any:
        """
        Returns a copy of the given value where sensitive entries of mappings (at any depth) are replaced.

        :param value: a mapping, a list, or any other value (returned as is)
        :return: the sanitized copy
        """
        if not self.prefixes:
            return value
        if isinstance(value, t.Mapping):
            return {
                k: FILTERED if self.is_sensitive(k) else self.sanitize(v) for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self.sanitize(v) for v in value]
        return value

"""Defines the class for representing a note, :class:`Note`."""

from dataclasses import dataclass


@dataclass
class Note:
    """A named piece of text, stored as a single file in a repo's root directory."""

    name: str
    """The note's identifier, which is also its filename."""

    text: str
    """The full content of the note, stored verbatim."""

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'name': self.name,
            'text': self.text,
        }

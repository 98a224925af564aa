"""Contact directory contract: resolves a customer id to an email address.

Customer accounts live with the identity provider, not in this context.
"""

from abc import ABC, abstractmethod


class ContactLookupError(Exception):
    """The directory could not be reached or answered with an error."""


class ContactDirectory(ABC):
    @abstractmethod
    def email_for(self, customer_id: str) -> str | None:
        """The customer's email address, or None when the directory has none on file.

        Raises ContactLookupError when the directory cannot answer.
        """
        ...

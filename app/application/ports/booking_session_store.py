from abc import ABC, abstractmethod

from app.domain.entities.booking_snapshot import BookingSnapshot


class BookingSessionStorePort(ABC):
    @abstractmethod
    def save(self, session_id: str, snapshot: BookingSnapshot) -> None:
        raise NotImplementedError

    @abstractmethod
    def load(self, session_id: str) -> BookingSnapshot | None:
        """
        Load the last snapshot for a session.
        Returns None if nothing was saved or the stored data is unreadable.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

from gigs.stores.interfaces import ArtistStore, BookingStore, DocumentStore, EventStore

__all__ = ["ArtistStore", "BookingStore", "DocumentStore", "EventStore"]

from models.base import Base
from models.profile import Profile
from models.rating import Rating
from models.watchlist import WatchlistEntry

__all__ = ["Base", "Profile", "Rating", "WatchlistEntry"]

from .favorite import Favorite

MEDIA_TYPES = ("movie", "tv")

GENRE_MAP = {
    "action": 28, "adventure": 12, "animation": 16,
    "comedy": 35, "crime": 80, "documentary": 99,
    "drama": 18, "fantasy": 14, "horror": 27,
    "romance": 10749, "sci-fi": 878, "science-fiction": 878,
    "thriller": 53, "war": 10752,
}

# Landing page rows, in display order: (slug, title, path, extra params)
HOME_SECTIONS = [
    ("trending", "Recommended", "/trending/all/week", {}),
    ("popular", "Popular", "/movie/popular", {}),
    ("toprated", "Top Rated", "/movie/top_rated", {}),
    ("action", "Action", "/discover/movie", {"with_genres": GENRE_MAP["action"]}),
    ("comedy", "Comedy", "/discover/movie", {"with_genres": GENRE_MAP["comedy"]}),
    ("horror", "Horror", "/discover/movie", {"with_genres": GENRE_MAP["horror"]}),
    ("romance", "Romance", "/discover/movie", {"with_genres": GENRE_MAP["romance"]}),
    ("documentary", "Documentary", "/discover/movie", {"with_genres": GENRE_MAP["documentary"]}),
]

MAX_CAST = 10
TRAILER_EMBED_URL = "https://www.youtube.com/embed/{key}"
MISSING_OVERVIEW = "Description not available."

"""
Genre names for NFO files

Genres are kept under their English name. They are written in the NFO
language and every known localized or alternate spelling is read back
to the English name. Unknown genres pass through unchanged.
"""
from typing import Dict, Optional

from nfobridge.utils.languages import name_language

# English: (German, alternate spellings)
_GENRES = {
    "Action": ("Action", ()),
    "Adventure": ("Abenteuer", ()),
    "Animation": ("Animation", ("Animated", "Zeichentrick")),
    "Animal": ("Tierfilm", ()),
    "Anime": ("Anime", ()),
    "Biography": ("Biografie", ("Biopic", "Biographie")),
    "Comedy": ("Komödie", ("Komoedie",)),
    "Crime": ("Krimi", ("Kriminalfilm",)),
    "Disaster": ("Katastrophenfilm", ()),
    "Documentary": ("Dokumentarfilm", ("Dokumentation", "Doku")),
    "Drama": ("Drama", ()),
    "Eastern": ("Eastern", ()),
    "Erotic": ("Erotik", ()),
    "Family": ("Familie", ("Familienfilm",)),
    "Fan Film": ("Fanfilm", ()),
    "Fantasy": ("Fantasy", ()),
    "Film Noir": ("Film Noir", ("Film-Noir",)),
    "Foreign": ("Ausländisch", ()),
    "Game Show": ("Spielshow", ("Gameshow",)),
    "History": ("Historie", ("Historical", "Geschichte", "Historienfilm")),
    "Holiday": ("Feiertage", ()),
    "Horror": ("Horror", ()),
    "Indie": ("Indie", ("Independent",)),
    "Music": ("Musik", ()),
    "Musical": ("Musical", ()),
    "Mystery": ("Mystery", ()),
    "Neo-noir": ("Neo-Noir", ()),
    "News": ("Nachrichten", ()),
    "Reality TV": ("Reality-TV", ("Reality", "Reality-TV")),
    "Road Movie": ("Roadmovie", ()),
    "Romance": ("Liebesfilm", ("Romantik", "Romanze")),
    "Science Fiction": ("Science Fiction", ("Sci-Fi", "SciFi", "Science-Fiction")),
    "Series": ("Serie", ()),
    "Short": ("Kurzfilm", ("Short Film",)),
    "Silent Movie": ("Stummfilm", ("Silent",)),
    "Sport": ("Sport", ("Sports", "Sportfilm")),
    "Suspense": ("Suspense", ()),
    "Talk Show": ("Talkshow", ()),
    "TV Movie": ("TV-Film", ("TV Film", "Fernsehfilm")),
    "Thriller": ("Thriller", ()),
    "War": ("Kriegsfilm", ("Krieg",)),
    "Western": ("Western", ()),
}


def _build_lookup() -> Dict[str, str]:
    lookup = {}
    for english, (german, alternates) in _GENRES.items():
        for key in (english, german, *alternates):
            lookup.setdefault(key.lower(), english)
    return lookup


_LOOKUP = _build_lookup()


def canonical_genre(value: Optional[str]) -> str:
    """English name of a genre given in any known spelling; unknown names unchanged"""
    name = (value or "").strip()
    return _LOOKUP.get(name.lower(), name)


def localized_genre_name(nfo_language: str, value: str) -> str:
    """
    Name a genre in the NFO language

    Args:
        nfo_language: Target language code
        value: Genre in any known spelling

    Returns:
        The localized name, or the value unchanged if the genre is unknown
    """
    english = _LOOKUP.get(value.strip().lower())
    if english is None:
        return value
    if name_language(nfo_language) == "de":
        return _GENRES[english][0]
    return english

"""ytgrab — YouTube search scraping and download-redirect service.

Scrapes the server-rendered search page for video metadata and resolves
downloadable renditions through yt-dlp, exposed over a small Flask API.
"""

from ytgrab.version import __version__

__all__: list[str] = ["__version__"]

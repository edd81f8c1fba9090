"""
DocIntro: doctor directory with recorded introduction videos

Doctors are registered through a small CRUD API, receive an emailed link to
record a short introduction, and the browser streams the recording back in
chunks that the service merges into a single playable video.
"""

__version__ = "0.1.0"
__author__ = "DocIntro Team"
__description__ = "Doctor directory with recorded introduction videos"

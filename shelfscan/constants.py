#!/usr/bin/env python3
"""
Shared constants for Plex naming verification

Single source of truth for extras names, split-part tokens and tag prefixes.
DO NOT duplicate these lists in other modules - import from here instead.
"""

# Media files picked up by the library scan
MEDIA_EXTENSIONS = ['.mkv', '.mp4', '.avi']

# Plex optimized-version folders, never scanned
SKIPPED_FOLDERS = ['Plex Versions']

# Valid subdirectories for movie extras
EXTRA_SUBDIRECTORIES = [
    'Behind The Scenes',
    'Deleted Scenes',
    'Featurettes',
    'Interviews',
    'Scenes',
    'Shorts',
    'Trailers',
    'Other',
]

# Suffixes for inline local extras (before the extension)
INLINE_EXTRA_SUFFIXES = [
    '-behindthescenes',
    '-deleted',
    '-featurette',
    '-interview',
    '-scene',
    '-short',
    '-trailer',
    '-other',
]

# Split/part tokens for multi-file movies: "Movie (2020) - pt1"
SPLIT_PART_TOKENS = ['cd', 'disc', 'disk', 'dvd', 'part', 'pt']

# Tag prefixes that Plex expects in {...}, not [...]
CURLY_TAG_PREFIXES = ['tmdb', 'tvdb', 'imdb', 'edition']

# Metadata agents allowed as an ID tag on a show folder
SHOW_ID_AGENTS = ['tmdb', 'tvdb', 'imdb']

EARLIEST_MOVIE_YEAR = 1900

SPECIALS_FOLDER = 'Specials'
ZERO_SEASON_FOLDERS = ['Season 0', 'Season 00']

# Media-type overrides, keyed on the first two letters of the argument
MEDIA_TYPE_ALIASES = {
    'mo': 'movie',  # movie(s)
    'fi': 'movie',  # film(s)
    'tv': 'tv',
    'sh': 'tv',     # show(s)
    'te': 'tv',     # television
}

# Correctness bands for the summary line, highest first
CORRECTNESS_BANDS = [
    (100.0, '(perfect score!)'),
    (95.0, '(excellent!)'),
    (90.0, '(great job!)'),
    (85.0, '(good effort)'),
]

# Self-test fixture folders, relative to the test base folder
SELF_TEST_FOLDERS = [
    'pass/movies',
    'pass/tv',
    'fail/movies',
    'fail/tv',
]

NAMING_GUIDES = [
    'https://support.plex.tv/articles/naming-and-organizing-your-tv-show-files/',
    'https://support.plex.tv/articles/naming-and-organizing-your-movie-files/',
]

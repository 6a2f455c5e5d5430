"""
Emoji Leaderboard - Core Package

This package contains the core modules for:
- Slack data ingestion with a daily on-disk cache (emoji_leaderboard.ingestion)
- Uploader ranking and rendering (emoji_leaderboard.leaderboard)
- Shared configuration, errors and utilities
"""

__version__ = "1.0.0"

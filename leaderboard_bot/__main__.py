"""
Entry point for running the bot as a module:
    python -m leaderboard_bot
"""
from leaderboard_bot.main import main


if __name__ == "__main__":
    main()

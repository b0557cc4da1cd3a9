"""Alge-Bro - AI-generated Math & Science lessons with timed quizzes and streaks."""

__version__ = "0.1.0"

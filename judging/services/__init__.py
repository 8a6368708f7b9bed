"""
Services module for the Audition Judging Platform.
"""

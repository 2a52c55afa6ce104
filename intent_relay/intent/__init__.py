"""Intent parsing and validation.

The intent layer converts an English free-text search query into a strict `Intent` object (a
frontend route plus optional franchise filters) that the web client uses for navigation.
"""

"""Modified-Leitner flashcard scheduler."""

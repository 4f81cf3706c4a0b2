"""lexideck: spaced-repetition scheduling for two-way vocabulary decks."""

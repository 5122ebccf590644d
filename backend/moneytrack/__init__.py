"""MoneyTrack personal finance backend."""

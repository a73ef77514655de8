"""Layout engine, compound composer and their helpers."""

"""Block layout for sitelen sitelen: tile sized glyph units into compact containers."""

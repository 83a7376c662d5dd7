"""
Offline recipe engine.

Responsibilities:
- Hold the shared vocabularies (units, dietary tags, allergens, equipment).
- Match pantry items against recipe ingredients.
- Score and select a bounded, diverse set of recipes for the user.
- Derive swap suggestions, scale quantities and export recipes as text.
"""

"""
LLM integration layer.

Responsibilities:
- Manage model endpoint configuration and credentials.
- Build prompts and the structured-output schema from user intent.
- Call the model, falling back to an unstructured request on failure.
- Extract JSON from the reply and normalize it into safe recipes.
"""

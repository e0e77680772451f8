"""pft_server — FastAPI REST API for the PFT interpretation engine.

Exposes the InterpretationEngine as a stateless HTTP API: single and batch
interpretation plus read-only grading-table reference endpoints.  Nothing
is stored between requests.
"""

"""wellness_server — FastAPI REST API for the wellness assessment.

Accepts submissions, scores and stores them, serves reports by submission
id and forwards reports to an optional insight generator.
"""

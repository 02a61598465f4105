"""
Evaluation suite for the EmailBuddy companion.

Run all: pytest evals/ -v
Run one area: pytest evals/tasks/test_pipeline_evals.py -v

Everything runs offline: providers are fakes, the Ollama daemon is an
httpx.MockTransport, and EMAILBUDDY_HOME points at a temp directory.
"""

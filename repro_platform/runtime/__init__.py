"""
Runtime collaborators: configuration, LLM clients and the report summarizer.
"""

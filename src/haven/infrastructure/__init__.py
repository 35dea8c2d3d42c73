"""
Infrastructure Layer

External integrations: voice output, metrics, error tracking.
"""

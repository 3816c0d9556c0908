"""
Integrations Package

Backend gateway and payment processor hand-off.
"""

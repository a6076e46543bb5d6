"""
Utility subpackage for undrstnd.

Small helpers shared by the model adapter and the provider facade:
JSON parsing of response bodies, proxy-aware HTTP sessions and URL
normalisation.
"""

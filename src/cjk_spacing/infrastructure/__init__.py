"""
Infrastructure layer.

Components:
- spacing: CJK/English spacing passes, the rule registry and registered rules
"""

"""
Application Layer for the progression engine.

This package contains:
- ports/: Abstract repository interfaces (what the use cases need)
- use_cases/: Workflows that load a workout, drive the aggregate and save it
- settings.py: Environment-driven defaults for new programs
"""

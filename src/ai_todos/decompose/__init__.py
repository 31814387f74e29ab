"""
Text-to-tasks decomposition.

Stages (leaves first):
- validator.py: trimmed, length-bounded input
- prompt.py: versioned instruction template
- normalizer.py: strict JSON parse + per-element cleanup
- materializer.py: owner-stamped batch insert
- pipeline.py: wires the stages into one awaitable run
"""

"""Core alignment stages and the intermediate representation.

WHY: The core is the pure part of the package — no file, network or
provider code — so each stage can be tested in isolation and the whole
pipeline can run concurrently across jobs.

HOW: ir.py defines the records; tokenizer.py, flatten.py, aligner.py,
interpolate.py and chunks.py are the stages; pipeline.py composes them.
serialization.py, corrections.py and playback.py operate on the
finished result.

RULES:
- IR dataclasses are the contract — change with care
- Stages return new records; nothing is mutated in place
"""

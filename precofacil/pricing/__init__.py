"""
Price attachment.

Responsibilities:
- Attach real (LLM-sourced) prices to each found establishment.
- Fall back to category-specific synthetic products when no real price is found.
- Bound concurrency: lookups run in fixed-size batches.
"""

"""Chart configuration reconciliation.

Charts are driven by JSON configuration trees (data sections, style and
setting nodes). This package reconciles a previously built configuration with
the schema of a new chart type, and holds the metadata, header and validation
helpers the UI layer uses around that step. It is Django-free.
"""

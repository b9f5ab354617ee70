"""
Pydantic schemas: listing queries, pagination, the response envelope
and the wire projections of every entity.
"""

"""
Resource services.

Plain async functions taking an explicit RecordStore. They validate input,
run their statements and return API-ready records. The HTTP layer and the
tests call them directly.
"""

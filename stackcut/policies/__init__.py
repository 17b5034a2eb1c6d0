"""Cut policies: pluggable sources of the "cut requested" signal.

A human pressing a key and an automated policy both end up calling
`StackEngine.request_cut`, so the engine never knows who asked.
"""

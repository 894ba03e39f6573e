"""
GPS Logger Services

- logs - Persisted log lines and the polling log view
- export - Plain-text export of the log view
- location - Last-known coordinate, town lookup, message composer
- notify - Permission-gated one-shot alerts
- social - Compose-and-post of the current location
- tracking - Background location sampling and its start/stop switch
"""

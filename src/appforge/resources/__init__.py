"""
Packaged asset trees read through the `resource:` protocol.

Layout: `apps/<kind>/common` is copied for every target,
`apps/<kind>/<infra>-<flavor>` only for that infrastructure flavor.
"""

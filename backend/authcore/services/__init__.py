"""Service layer.

Subpackages
-----------
- :mod:`authcore.services.session`: token issuance, refresh validation and
  revocation (:class:`SessionService`).
- :mod:`authcore.services.auth`: register / login / refresh / profile
  (:class:`AuthService`).
- :mod:`authcore.services.providers`: per-application wiring of both.

Nothing is re-exported here: :mod:`authcore.core.extensions` imports the
ports during app setup and must not pull the services in with them.
"""

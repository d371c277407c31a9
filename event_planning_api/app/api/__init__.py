"""
HTTP layer of the Event Planning API.

Routes are grouped by API version (currently only ``v1``).  Each
version subpackage exposes one ``router`` that ``main`` mounts under
``/api/<version>``.
"""

"""
Service layer abstraction.

Each service encapsulates business logic for one entity.  Every
service method takes the acting user's identifier explicitly and
checks event ownership through ``AccessGuard`` before reading or
changing any record.
"""

"""
Customers module.

Scope:
- Customer entity (id, name)
- CustomerStore: list, get by id, exact lookup by name, persist
- JSON API under /customer
"""

"""Storefront admin backend: products, orders, users, settings and shipping."""

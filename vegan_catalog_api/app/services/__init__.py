"""
Service layer.

``counter_service`` and ``product_store`` hold the two durable regions
(the identifier counter and the product map); ``product_service`` owns
one of each and implements the catalog operations on top of them.
"""

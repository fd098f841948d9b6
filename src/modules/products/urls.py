"""Product URL configuration.

``lookup_value_regex`` on the viewset keeps ``products/{id}/`` numeric, so
the stock and id-range routes never collide with the detail route.
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.products.views import ProductViewSet

router = SimpleRouter(trailing_slash=True)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls

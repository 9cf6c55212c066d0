from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import UserViewSet, initialize_data

router = SimpleRouter(trailing_slash=False)
router.register("users", UserViewSet, basename="user")

urlpatterns = [
    path("api/init-data", initialize_data, name="init-data"),
    path("api/", include(router.urls)),
    path("api/", include("tracker.api.urls")),
]

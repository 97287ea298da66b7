"""URL routing for the CoinLeague service.


The /api/ namespace exposes token resolution and account identity endpoints.
Operator actions (sync, reset) are management commands and have no route.
"""

from django.contrib import admin
from django.urls import path, include


urlpatterns = [
	path("admin/", admin.site.urls),
	path("api/", include("api.urls")),
]

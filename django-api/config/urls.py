from django.contrib import admin
from django.urls import include, path

from gigs.handlers import metrics_view

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("gigs.urls")),
    path("metrics", metrics_view, name="metrics"),
]

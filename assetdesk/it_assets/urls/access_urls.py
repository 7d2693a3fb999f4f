from django.urls import path
from it_assets.views.access_view import MeView, LocationListView, NetworkPingView

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("locations/", LocationListView.as_view(), name="location-list"),
    path("network/ping/", NetworkPingView.as_view(), name="network-ping"),
]

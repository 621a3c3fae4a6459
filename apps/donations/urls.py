from django.urls import path

from .views import DonationDetailView, DonationListCreateView, DonationStatsView, DonationStatusView

urlpatterns = [
    path("donations",                     DonationListCreateView.as_view(), name="donation-list"),
    path("donations/stats",               DonationStatsView.as_view(),      name="donation-stats"),
    path("donations/<int:pk>",            DonationDetailView.as_view(),     name="donation-detail"),
    path("donations/<int:pk>/status",     DonationStatusView.as_view(),     name="donation-status"),
]

from django.urls import path

from .views import ContactView, PartnershipInquiryView, WorkshopRegistrationView

urlpatterns = [
    path("contact",                ContactView.as_view(),              name="contact"),
    path("send-partnership-email", PartnershipInquiryView.as_view(),   name="partnership-inquiry"),
    path("register",               WorkshopRegistrationView.as_view(), name="workshop-register"),
]

from django.urls import path

from .views import PaymentInitializeView, PaymentVerifyView, PaymentWebhookView

urlpatterns = [
    path("payment/initialize",             PaymentInitializeView.as_view(), name="payment-initialize"),
    path("payment/verify/<str:reference>", PaymentVerifyView.as_view(),     name="payment-verify"),
    path("payment/webhook",                PaymentWebhookView.as_view(),    name="payment-webhook"),
]

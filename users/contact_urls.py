# users/contact_urls.py
from django.urls import path
from .views import ContactMatchView

urlpatterns = [
    path("match", ContactMatchView.as_view(), name="contacts-match"),
]

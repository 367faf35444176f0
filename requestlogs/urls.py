from django.urls import path

from . import views

urlpatterns = [
    path("", views.admin_ajax, name="admin_ajax"),
    path("nonce/", views.issue_nonce, name="admin_ajax_nonce"),
]

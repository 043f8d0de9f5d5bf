"""
URL configuration for workforce_reports project.

Reports are consumed through the service layer; only the admin is routed here.
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path('admin/', admin.site.urls),
]

# Admin site customization
admin.site.site_header = 'Workforce Reports Administration'
admin.site.site_title = 'Workforce Reports Admin'
admin.site.index_title = 'Welcome to Workforce Reports Admin'

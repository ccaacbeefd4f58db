from django.contrib import admin

# Customize admin site
admin.site.site_header = "StayTrack - Admin Panel"
admin.site.site_title = "StayTrack Admin"
admin.site.index_title = "Hostel & PG Administration"

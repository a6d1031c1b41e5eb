"""Ward application: patient records, application users and roles.

This package contains the models, the access rule gate, the patient CRUD
pages and the bootstrap seeder of the ward project.
"""

"""
Payment License Service Django project.
"""

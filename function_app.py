"""
Main function_app.py for the IP Check-in Function App.

Registers the Blueprint from the ip_checkin package.
"""
import azure.functions as func

from ip_checkin.function_app import bp as ip_checkin_bp

# Create the main Function App and register Blueprints
app = func.FunctionApp()
app.register_functions(ip_checkin_bp)

# Plugins package

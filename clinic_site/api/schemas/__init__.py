# This file marks the schemas package for API request and response models.
# It exists so schema modules can be imported as one coherent namespace.
# Grouping contracts here keeps validation rules and envelopes easy to navigate.
# Explicit package markers also improve static analysis and test discovery.

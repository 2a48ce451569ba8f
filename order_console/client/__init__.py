"""Python models of the console's browser workflows.

These classes hold the state the order and specification pages keep in
the browser and talk to the API over HTTP, so the workflows can be
scripted and tested without a browser.
"""

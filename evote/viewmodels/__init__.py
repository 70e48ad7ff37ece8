"""ViewModel package for form state and command surfaces.

Call context:
    ``evote/app/controller.py`` builds one ``FormVM`` per page and binds it to
    its ``SubmitForm`` use case.

Dependencies:
    Domain types and the use-case result types only. I/O adapters and request
    orchestration remain outside.
"""

"""Test package for the tuic calculator.

The ``*_core`` modules exercise the headless focus, navigation, dispatch and
arithmetic layers without pygame.  The smoke tests drive the pygame shell with
the SDL dummy video driver so no real window is opened.  Run ``pytest`` from
the project root.
"""

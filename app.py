"""Gradio launcher for the fakeword generator."""

from fakeword.app.app import main

if __name__ == "__main__":
    main()

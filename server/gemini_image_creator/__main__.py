from gemini_image_creator.cli import app

app(prog_name="gemini-image-creator")

"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='quill-lang',
	version='0.1.0',
	packages=['quill'],
	license='MIT',
	description='Run-time for Quill, a small imperative scripting language with strict dynamic types',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		"test": ["pytest"],
	},
)

from setuptools import setup, find_namespace_packages

setup(name='seoinspector',
      version="0.1",
      description='Run on-page SEO checks and plugin checks against an HTML page',
      long_description='',
      author='Paul',
      author_email='paulxiep@outlook.com',
      url='',
      packages=find_namespace_packages(include=['seoinspector', 'seoinspector.*']),
      python_requires='>=3.10',
      install_requires=[
          "requests>=2.31",
          "beautifulsoup4>=4.12",
      ],
      extras_require={
          "test": ["pytest>=7.4"],
      },
      license='Private',
      zip_safe=False,
      keywords='seo html inspector plugins',
      classifiers=[''])

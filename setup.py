from setuptools import setup, find_packages

setup(
    name="pyadaptfilt",
    packages=find_packages(
        include=["pyadaptfilt", "pyadaptfilt.*"]),
    version='0.1.0',
    description="Online adaptive filters (LMS, NLMS, SSLMS, GNGD, RLS, Affine Projection) for streaming signals.",
    keywords=["Adaptive", "Filtering", "Digital", "Signal", "Processing", "LMS", "RLS"],
    python_requires=">=3.8",
    install_requires=[
        'numpy',
        'scipy',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3'
    ]

)
